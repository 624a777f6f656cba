"""
LLM integration layer.

Responsibilities:
- Manage OpenRouter API configuration and credentials.
- Build prompts from the user query and the retrieved restaurants.
- Call the chat-completion endpoint to pick the best restaurant.
- Map the model's free-form reply back onto retrieved restaurants, with a
  fallback when the reply cannot be parsed.
"""
