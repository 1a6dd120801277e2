"""Access log distribution reports by country, operating system and browser."""
