"""Exception types raised outside the rendering pipeline."""


class NotaraError(Exception):
    """Base class for notara errors."""


class ConfigError(NotaraError):
    """notara.toml could not be read or holds invalid values."""


class NoteNotFoundError(NotaraError):
    def __init__(self, note_id: str):
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id
