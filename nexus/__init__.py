"""Nexus AI Assistant - intent resolution service for the browser chat assistant."""
