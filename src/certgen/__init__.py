"""certgen: course certificate generator with CPF validation."""

__version__ = "0.1.0"
