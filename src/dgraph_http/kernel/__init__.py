"""Kernel – errors and transactional ports shared by every layer."""
