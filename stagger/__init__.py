"""stagger - staggered multi-property animation sequencing on Qt."""
