"""Domain services over the credential store and book repository."""
