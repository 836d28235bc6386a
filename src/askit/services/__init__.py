"""Domain services: tokens, identity checks, upserts and file hosting."""
