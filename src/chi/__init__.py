"""chi: copy standard input to standard output and to FILEs, optionally stripping ANSI escapes."""

APP_NAME = "chi"
__version__ = "0.1.0"
