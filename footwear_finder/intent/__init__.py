"""Intent extraction.

The intent layer sends a shopper's free-text request to Gemini and converts the JSON object in the
reply into a `QueryIntent`, which then drives table resolution and the parameterized catalog query.
"""
