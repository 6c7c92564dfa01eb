"""Workers package: one-shot jobs that write into the store."""
