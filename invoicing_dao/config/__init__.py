"""
Configuration loading for the invoicing DAO.
"""
