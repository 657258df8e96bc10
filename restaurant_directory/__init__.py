"""
Restaurant directory web application.

Responsibilities:
- List restaurants and render their detail and review pages.
- Accept reviews guarded by a reCAPTCHA verification.
- Accept contact-form submissions.
- Expose a small JSON CRUD API over the restaurant data.
"""
