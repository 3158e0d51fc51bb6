"""DeepSeek chat proxy: REST and GraphQL front ends over the DeepSeek completions API."""

__version__ = "2.0.0"
