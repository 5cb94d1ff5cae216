"""Captain (guard) roster proxy for a single live room."""
