"""Game and bookkeeping logic for group-chat bots: draws, sign-ins, sleep tracking, tarot, marriages and more."""

__version__ = "0.1.0"