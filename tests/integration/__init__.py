"""
API test package for the task manager.

Tests use the Flask test client and demonstrate:
- CRUD operation testing
- Ownership enforcement testing
- Input validation testing
- Error handling testing
"""
