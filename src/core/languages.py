"""Language options shared by the API and the Streamlit UI.

The table is read-only: ``LanguageTable`` wraps a ``MappingProxyType`` so
callers can inject their own mapping (tests, alternative deployments)
without being able to mutate the module default.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

AUTO = "auto"
DEFAULT_SOURCE = AUTO
DEFAULT_TARGET = "en"


@dataclass(frozen=True)
class LanguageOption:
    """A selectable language (code + human-readable label)."""

    code: str
    label: str

    @property
    def source_only(self) -> bool:
        return self.code == AUTO


class LanguageTable(Mapping[str, str]):
    """Immutable code -> label mapping."""

    def __init__(self, labels: Mapping[str, str]) -> None:
        self._labels = MappingProxyType(dict(labels))

    def __getitem__(self, code: str) -> str:
        return self._labels[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def label(self, code: str) -> str:
        """Return the label for ``code``, or the raw code when unmapped."""
        return self._labels.get(code, code)

    def options(self) -> list[LanguageOption]:
        return [LanguageOption(code=code, label=label) for code, label in self._labels.items()]

    def source_options(self) -> list[LanguageOption]:
        """All options, including the auto-detect sentinel."""
        return self.options()

    def target_options(self) -> list[LanguageOption]:
        """Options valid as a translation target (never ``auto``)."""
        return [opt for opt in self.options() if not opt.source_only]


LANGUAGES = LanguageTable(
    {
        AUTO: "Auto Detect",
        "en": "English",
        "es": "Spanish",
        "fr": "French",
        "de": "German",
        "it": "Italian",
        "pt": "Portuguese",
        "ru": "Russian",
        "zh": "Chinese",
        "ja": "Japanese",
        "ko": "Korean",
        "ar": "Arabic",
        "hi": "Hindi",
        "tr": "Turkish",
    }
)
