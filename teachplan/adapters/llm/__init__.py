from teachplan.adapters.llm.bedrock import BedrockAdapter

__all__ = ["BedrockAdapter"]
