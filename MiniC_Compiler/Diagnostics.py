ERROR = 'error'
WARNING = 'warning'


class Diagnostic:
    """A finding tied to a 1-based line/column of the original source."""

    def __init__(self, message, line, column, severity=ERROR, context=None, suggestions=None):
        if severity not in (ERROR, WARNING):
            raise ValueError(f"Unknown severity '{severity}'")
        self.message = message
        self.line = line
        self.column = column
        self.severity = severity
        self.context = context
        self.suggestions = list(suggestions) if suggestions else []

    @classmethod
    def fatal(cls, exc):
        detail = str(exc) or type(exc).__name__
        return cls(f"Fatal error: {detail}", 1, 1, ERROR)

    def to_dict(self):
        d = {
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
        }
        if self.context is not None:
            d["context"] = self.context
        if self.suggestions:
            d["suggestions"] = list(self.suggestions)
        return d

    def __eq__(self, other):
        if not isinstance(other, Diagnostic):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"{self.severity}: {self.message} (line {self.line}, column {self.column})"
