"""
Local chain layer: the chain binary wrapper, genesis reading and the
per-launch chain home.
"""

from netlaunch.chain.genesis import Genesis, read_genesis
from netlaunch.chain.runner import ChainRunner
from netlaunch.chain.workspace import ChainWorkspace, WorkspaceStage

__all__ = [
    "ChainRunner",
    "ChainWorkspace",
    "Genesis",
    "WorkspaceStage",
    "read_genesis",
]
