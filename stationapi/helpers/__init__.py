"""Pure helper functions shared by repositories and services."""
