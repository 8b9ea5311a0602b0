"""Intent classification, response orchestration and conversation services."""
