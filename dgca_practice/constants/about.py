"""Static metadata describing the practice application."""

APP_NAME = "DGCA Practice"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "DGCA Practice is a question-bank trainer for DGCA pilot examinations. "
    "Pick a subject, set a time limit and work through a timed practice test; "
    "results and per-subject progress are kept for the running session."
)

HELP_TEXT = (
    "Questions are loaded from question_bank.txt in the working directory. "
    "Each block describes one question:\n\n"
    "ID: met-001\n"
    "CATEGORY: meteorology\n"
    "Q: Which cloud type is associated with thunderstorms?\n"
    "A: Cirrus\nB: Cumulonimbus\nC: Stratus\nD: Altostratus\n"
    "CORRECT: B\n"
    "DIFFICULTY: easy\n"
    "EXPLANATION: Cumulonimbus clouds produce thunderstorms.\n\n"
    "Separate questions with a blank line or '---'."
)
