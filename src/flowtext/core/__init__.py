"""Core value types, collaborator protocols and offset helpers."""
