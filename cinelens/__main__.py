"""Permet `python -m cinelens`."""

from cinelens.main import main

main()
