"""Rules driven by the most recent session's FeedbackSignals."""
