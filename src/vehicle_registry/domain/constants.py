"""Limits shared by the entities, pagination and the API schemas."""

MAX_TEXT_LENGTH = 150

# Ids, years and page numbers are stored in or compared against 32-bit Integer columns
MIN_INTEGER = -2**31
MAX_INTEGER = 2**31 - 1
