"""Frontend package: C# source to declaration tree."""

from .parse import ParseError, parse
from .tokens import TokenizeError, tokenize
