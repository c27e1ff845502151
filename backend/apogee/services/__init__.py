"""Business operations layered over the repositories."""
