"""Rules driven by TrainingSignals and profile constraints."""
