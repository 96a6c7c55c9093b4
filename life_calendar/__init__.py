"""Life Calendar: a life measured in weeks."""
