"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or any rendering.
It deals with Geometry, Collisions and the .qads file format.
"""
