"""Expense Sheets: a single-page expense form that appends rows to a Google
Sheet through a user-configured Apps Script web app."""

__version__ = "0.1.0"
