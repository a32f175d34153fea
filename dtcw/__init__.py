"""
dtcw - docToolchain wrapper.

Decides whether docToolchain runs from a local installation, an SDKMAN
candidate or the Docker image, installs what is missing, and runs the
requested tasks.
"""
