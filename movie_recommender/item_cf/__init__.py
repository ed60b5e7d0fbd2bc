"""Item-item collaborative filtering over movie attribute vectors.

A user's rating for a movie is predicted from the ratings they gave to the k
movies they rated that sit closest to it in attribute space (cosine similarity).
"""
