"""Domain services: form validation, the Sheets client and the submission shell."""
