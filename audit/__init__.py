"""Offline invariant audit for the calculation core."""
