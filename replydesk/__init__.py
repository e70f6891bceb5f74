"""ReplyDesk: drafting replies to citizen feedback."""

__version__ = "0.1.0"
