"""workbind command line interface."""
