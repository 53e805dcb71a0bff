"""Domain services: identity, sessions, notes, audit, outage toggle, policy."""
