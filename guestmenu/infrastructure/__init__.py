"""Infrastructure: Firebase REST clients, mail transports, security."""
