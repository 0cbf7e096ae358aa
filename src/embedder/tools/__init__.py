# -----------------------------------------------------------
# Matryoshka Embedding Service
# Reusable pipeline functions with dependency injection.
#
# (C) 2025-2026 Juan-Francisco Reyes, Cottbus, Germany
# Released under MIT License
# email pacoreyes@protonmail.com
# -----------------------------------------------------------

"""Reusable pipeline functions with dependency injection."""
