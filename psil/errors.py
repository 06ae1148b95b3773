class PsilError(Exception):
    """ Base class for all Psil errors"""
    pass

class PsilSyntaxError(PsilError):
    """ Raised when the source text is not a well-formed symbolic expression"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)

class PsilElaborationError(PsilError):
    """ Raised when a symbolic expression matches no known Psil form"""

class PsilTypeError(PsilError):
    """ Raised when an expression is ill-typed"""

class PsilUnknownVariable(PsilTypeError):
    """ Raised when a variable is used before it is bound"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown variable: {name!r}")

class PsilRuntimeError(PsilError):
    """ Raised when evaluation reaches a state it cannot reduce"""

class PsilMissingDefinition(PsilError):
    """ Raised when a type declaration is never followed by its definition"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing definition for: {name}")

class PsilNestingError(PsilError):
    """ Raised when a program is nested more deeply than the interpreter can follow"""

    def __init__(self, message: str = "Program is nested too deeply"):
        super().__init__(message)
