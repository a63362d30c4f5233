"""Project-wide helpers shared by the HouseHub apps."""
