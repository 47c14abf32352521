"""Fast preset: float64 coordinates, approximate once values pass 2**53."""

backend = "double"
length = "minlength"
iterations = 50
