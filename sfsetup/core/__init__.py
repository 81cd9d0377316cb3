"""
Site Factory Setup Core

The provisioning workflow.
"""

from .orchestrator import (
    ProvisioningOrchestrator,
    WorkflowContext,
    WorkflowResult,
)

__all__ = [
    "ProvisioningOrchestrator",
    "WorkflowContext",
    "WorkflowResult",
]
