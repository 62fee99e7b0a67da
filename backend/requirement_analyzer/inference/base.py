from abc import ABC, abstractmethod
from typing import Any, Dict, List


class LLMClient(ABC):
    @abstractmethod
    def generate(self, model: str, messages: List[Dict]) -> Dict[str, Any]:
        """
        Run one chat completion against `model` and return the decoded
        provider payload. Failures raise ProviderError.
        """
        pass
