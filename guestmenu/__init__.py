"""GuestMenu privileged backend: role claims, tenant deletion, order notifications."""
