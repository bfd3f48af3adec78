"""
AI Module - Everything that talks to, or interprets, the hosted model.

Submodules:
- providers: Gemini client wrapper (JSON mode, grounding, timeouts)
- prompts: Fixed system instruction and response schema
- intent: ClassifiedIntent schema and the classifier adapter
- actions: App-scheme registry and outbound URL builders
- schemas: AssistantResponse contract consumed by the front end
- monitoring: Structured logging and usage metrics
"""
