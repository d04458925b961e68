"""Route blueprints for the Quotebox web app."""
