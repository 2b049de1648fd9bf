"""Phase model, new-moon locator and visibility assessor."""
