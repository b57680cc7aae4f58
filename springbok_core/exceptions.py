"""
Custom exceptions for the Springbok markup pipeline.

Malformed bill or law text never raises; those conditions are reported
through springbok_core.diagnostics. These exceptions cover invalid
invocation states and collaborator failures.
"""


class SpringbokError(Exception):
    """Base exception for Springbok errors."""
    pass


class ConfigError(SpringbokError):
    """Configuration value is missing or out of range."""
    pass


class LawTextMissingError(SpringbokError):
    """Markup was requested for a law key that has no fetched text."""

    def __init__(self, chapter_section_key: str):
        super().__init__(f"No fetched law text for {chapter_section_key}")
        self.chapter_section_key = chapter_section_key


class UnresolvedBillSectionError(SpringbokError):
    """A backref names a bill section that is not part of the bill."""

    def __init__(self, chapter_section_key: str, section_number: str):
        super().__init__(
            f"Bill section {section_number!r} referenced by {chapter_section_key} "
            "is not in the bill"
        )
        self.chapter_section_key = chapter_section_key
        self.section_number = section_number


class LegislatureFetchError(SpringbokError):
    """The legislature website returned an error or an unexpected page."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason


class UnknownRefinerError(SpringbokError):
    """A search refinement value is not offered by the search page."""

    def __init__(self, refinement: str, value: str, choices: list[str]):
        super().__init__(
            f"Unknown {refinement} {value!r}; choose one of: {', '.join(choices) or 'none'}"
        )
        self.refinement = refinement
        self.value = value
        self.choices = choices
