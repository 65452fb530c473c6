"""Base classes for parser and formatter options.

This module defines the foundation classes for the option records used
throughout the glfm_markdown rendering pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from glfm_markdown.exceptions import InvalidOptionsError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build an instance from a mapping of field names to values.

        Keys may use hyphens instead of underscores, as configuration
        files usually do.

        Parameters
        ----------
        data : Mapping[str, Any]
            Field values

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        InvalidOptionsError
            If the mapping contains keys that are not fields of this class

        """
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        normalized = {str(key).replace("-", "_"): value for key, value in data.items()}
        unknown = sorted(set(normalized) - known)
        if unknown:
            raise InvalidOptionsError(
                cls.__name__,
                cls,
                type(data),
                message=f"Unknown option(s) for {cls.__name__}: {', '.join(unknown)}",
            )
        return cls(**normalized)

    def _validate_bool_fields(self) -> None:
        """Reject non-boolean values in fields declared as ``bool``."""
        for f in fields(self):  # type: ignore[arg-type]
            if f.type in ("bool", bool) and not isinstance(getattr(self, f.name), bool):
                raise InvalidOptionsError(
                    type(self).__name__,
                    type(self),
                    type(getattr(self, f.name)),
                    message=f"{f.name} must be a bool, got {getattr(self, f.name)!r}",
                )
