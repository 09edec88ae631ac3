"""
This orm module contains the ORM (Object-Relational Mapping) models connecting to the PostgreSQL
database used in PhoneCall-Graph.
It contains the ORM models, repositories, Unit of Work patterns, services and database connection utilities.
"""
