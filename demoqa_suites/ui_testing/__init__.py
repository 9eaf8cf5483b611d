"""UI automation layer for demoqa.com: framework, page objects and scenarios."""
