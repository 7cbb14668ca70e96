"""Controllers coordinating engines and storage."""
