"""Help Center content: fetch specifications and the step replacement operation."""
