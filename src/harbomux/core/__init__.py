"""Session orchestration core for harbomux."""
