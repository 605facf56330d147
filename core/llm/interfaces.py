"""
Embedding Provider Interface - Abstract base for embedding services.

This module defines the interface for embedding services (OpenAI, Azure OpenAI, ...).
"""
from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """
    Abstract Interface for Embedding Providers.

    Implementations raise ProviderUnavailableError on quota, network or
    timeout problems, and MalformedInputError for empty input text.
    """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Identifier of the model producing the vectors."""
        pass

    @abstractmethod
    def generate_embedding(self, text: str) -> List[float]:
        """
        Generate a vector embedding for the given text.
        """
        pass
