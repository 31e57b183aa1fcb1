"""HTTP surface for front ends reporting interactions and reading layouts."""
