"""
dataModel.py

This module defines the data models used throughout the tfizz application.
The models leverage Pydantic for validation and type safety.

Features:
- The external token received from the third-party token service.
- The result of a token fetch as seen by the command layer.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, Optional


class ExternalToken(BaseModel):
    """
    A single (divisor, word) rule received from a third-party service.

    Numbers divisible by `number` are replaced with `word`. Field names are
    matched case-insensitively, the service answers with either `number` or
    `Number`.

    Attributes:
        number (int): The divisor.
        word (str): The word emitted for multiples of `number`.
    """

    number: int = Field(..., description="Divisor of the rule.")
    word: str = Field(..., description="Word emitted for multiples of the divisor.")

    @model_validator(mode="before")
    @classmethod
    def keys_normalize(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                (k.lower() if isinstance(k, str) else k): v for k, v in data.items()
            }
        return data

    @property
    def tokens(self) -> dict[int, str]:
        """The rule as a one-entry divisor -> word mapping."""
        return {self.number: self.word}


class FetchResult(BaseModel):
    """
    Result of an external token fetch.

    Attributes:
        status (bool): Whether a token was obtained.
        token (Optional[ExternalToken]): The token, when status is True.
        unavailable (bool): True when the service reported itself unavailable.
        message (Optional[str]): Additional context, typically the failure reason.
    """

    status: bool
    token: Optional[ExternalToken] = None
    unavailable: bool = False
    message: Optional[str] = Field(
        default=None, description="Additional context or information."
    )
