"""Runner Social conversation and notification service."""
