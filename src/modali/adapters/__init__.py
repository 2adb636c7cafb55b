"""UI front-ends driving a which-key session."""
