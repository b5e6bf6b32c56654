"""Exception taxonomy for the question pipeline."""


class IntentBotError(Exception):
    """Base class for every error raised by intent_bot."""


class CorpusError(IntentBotError):
    """Intent data could not be loaded or failed validation."""


class DecodingError(IntentBotError):
    """The raw ``q`` query parameter is not valid percent-encoded UTF-8."""


class ConversionError(IntentBotError):
    """A unit conversion could not be performed."""


class SummaryNotFound(IntentBotError):
    """The encyclopedia has no article for the requested topic."""


class SummaryLookupError(IntentBotError):
    """The encyclopedia lookup failed (transport or unexpected response)."""
