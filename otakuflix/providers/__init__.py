"""File host clients producing raw episode records."""
