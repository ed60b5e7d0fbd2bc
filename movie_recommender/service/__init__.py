"""HTTP front-end for the recommender engine."""
