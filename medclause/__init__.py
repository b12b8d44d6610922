"""MedClauseX - AI-assisted medical analysis service."""
