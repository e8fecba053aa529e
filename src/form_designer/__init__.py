"""Interactive form designer: field model, views and debounced commits"""
