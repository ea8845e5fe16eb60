"""Dominican Republic vehicle import cost calculator package."""
