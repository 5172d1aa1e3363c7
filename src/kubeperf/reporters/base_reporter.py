"""
Defines the abstract base class for all reporters.
"""

from abc import ABC, abstractmethod

from ..models.deployment import AnalysisResult


class BaseReporter(ABC):
    """
    Abstract Base Class for all reporters.
    """

    @abstractmethod
    def report(self, result: AnalysisResult):
        """
        Takes the finished analysis and presents it (e.g., in the console).
        """
        pass
