"""Third-party integrations outside Firebase."""
