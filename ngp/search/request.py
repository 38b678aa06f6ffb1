"""Immutable description of one search session."""

from __future__ import annotations

from dataclasses import dataclass

LANGUAGE_EXTENSIONS: tuple[str, ...] = (".c", ".h", ".cpp", ".py", ".sh")


@dataclass(frozen=True)
class SearchRequest:
    pattern: str
    directory: str = "."
    ignore_case: bool = False
    raw: bool = False
    file_type: str | None = None

    def matcher_options(self) -> list[str]:
        return ["-i"] if self.ignore_case else []

    def is_eligible(self, name: str) -> bool:
        """Return whether a regular file named ``name`` should be searched.

        Raw mode accepts every file. Otherwise an explicit ``file_type`` suffix
        replaces the default language-extension set.
        """
        if self.raw:
            return True
        if self.file_type:
            return name.endswith(self.file_type)
        return name.endswith(LANGUAGE_EXTENSIONS)


__all__ = ["LANGUAGE_EXTENSIONS", "SearchRequest"]
