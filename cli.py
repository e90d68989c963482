"""Convenience shim that exposes the packaged cssident CLI."""

from cssident.cli import app, main

__all__ = ["app", "main"]

if __name__ == "__main__":
    main()
