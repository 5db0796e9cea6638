"""Terminal output: display nodes, rendering, progress bars, progress feed and prompts."""