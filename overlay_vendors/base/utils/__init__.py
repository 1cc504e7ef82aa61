"""Pure helpers shared by vendor protocol modules."""
