"""Cosmos catalog: public planet and galaxy pages with an admin back office."""
