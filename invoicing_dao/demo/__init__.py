"""
Demo data for trying the invoicing DAO from the command line.
"""
