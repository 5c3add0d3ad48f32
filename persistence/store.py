from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StoreError(BaseModel):
    message: str
    code: Optional[str] = None
    details: Optional[str] = None
    hint: Optional[str] = None

    def describe(self) -> str:
        if self.code is None:
            return f"Database Error: {self.message}"
        return f"Database Error: {self.message} (Code: {self.code})"


class InsertResult(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RegistrationStore(ABC):
    """
    Inserts one registration record. A rejected insert comes back as
    InsertResult.error; transport faults are raised.
    """

    @abstractmethod
    async def insert(self, record: Dict[str, str]) -> InsertResult:
        raise NotImplementedError
