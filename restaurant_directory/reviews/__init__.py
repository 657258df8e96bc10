"""
Review submission workflow.

Responsibilities:
- Verify the reCAPTCHA token before anything is written.
- Build the review with the fixed rating and the current timestamp.
- Persist it against the restaurant named in the path.
"""
