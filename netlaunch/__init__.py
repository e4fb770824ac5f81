"""
netlaunch: orchestration for joining and steering blockchain network launches.

Two workflows are exposed:

1. Chain init: Initialize a local validator home from a published
   launch record and produce a signed gentx
2. Campaign update: Submit name / metadata / total-supply propositions
   against an existing campaign record

Usage:
    from netlaunch.workflows import ChainInitWorkflow, CampaignUpdateWorkflow
"""

__version__ = "0.1.0"
