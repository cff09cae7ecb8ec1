"""MongoDB connection, schema and seeding for the MDM bootstrap."""
