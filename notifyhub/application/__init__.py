"""Application layer orchestrating the notification use cases."""
