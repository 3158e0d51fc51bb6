from __future__ import annotations

from ariadne import EnumType, gql, make_executable_schema

from .resolvers import mutation, query


type_defs = gql(
    """
    type Query {
      health: HealthStatus!
      apiConfig: APIConfig!
    }

    type Mutation {
      sendMessage(input: SendMessageInput!): ChatResponse!
    }

    type HealthStatus {
      status: String!
      timestamp: String!
      version: String!
    }

    type APIConfig {
      version: String!
      supportedModels: [String!]!
      maxTokens: Int!
      timestamp: String!
    }

    input SendMessageInput {
      message: String!
      messages: [ChatMessageInput!]
      userId: String
      sessionId: String
      model: String
      temperature: Float
      maxTokens: Int
    }

    input ChatMessageInput {
      role: ChatRole!
      content: String!
    }

    enum ChatRole {
      USER
      ASSISTANT
      SYSTEM
    }

    type ChatResponse {
      reply: String!
      status: ResponseStatus!
      timestamp: String!
      usage: TokenUsage
      error: String
      errorType: String
    }

    enum ResponseStatus {
      SUCCESS
      ERROR
    }

    type TokenUsage {
      promptTokens: Int!
      completionTokens: Int!
      totalTokens: Int!
    }
    """
)

# GraphQL enum names <-> canonical lower-case values used internally
chat_role = EnumType("ChatRole", {"USER": "user", "ASSISTANT": "assistant", "SYSTEM": "system"})
response_status = EnumType("ResponseStatus", {"SUCCESS": "success", "ERROR": "error"})

schema = make_executable_schema(type_defs, query, mutation, chat_role, response_status)
