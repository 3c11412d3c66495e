"""Binary navigation capture to text converter."""
