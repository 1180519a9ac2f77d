"""
Application слой домена Region OCR.

Содержит контекст сессии, оркестратор отправки, сценарий и фабрику.
"""

from .session import ImageSession
from .submission import SubmissionOrchestrator
from .workflow import RegionOCRWorkflow
from .factory import RegionOCRComponentFactory

__all__ = [
    "ImageSession",
    "SubmissionOrchestrator",
    "RegionOCRWorkflow",
    "RegionOCRComponentFactory",
]
