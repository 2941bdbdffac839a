class SubtitleError(Exception):
    """
    Base class for errors raised by the conversion engine
    """
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def __str__(self) -> str:
        if self.error:
            return f"{self.message} ({str(self.error)})" if self.message else str(self.error)
        return self.message or super().__str__()

class SubtitleInputError(SubtitleError):
    """
    The subtitle file could not be read or decoded
    """
    pass

class ConverterError(SubtitleError):
    """
    The script conversion capability could not be initialised.

    This is a precondition for a run, so it is raised before any file is processed.
    """
    pass

class RulesetError(SubtitleError):
    """
    A typo ruleset could not be loaded
    """
    pass
