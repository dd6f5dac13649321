from .orchestrator import AcquisitionOrchestrator

__all__ = ["AcquisitionOrchestrator"]
