"""
The MODEL layer contains pure data structures and the sampling logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with expressions, sampling and colors.
"""
