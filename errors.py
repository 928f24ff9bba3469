class SessionError(RuntimeError):
    """Unrecoverable failure that ends the browsing session."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path:
            return f"{message}: {self.path}"
        return message
