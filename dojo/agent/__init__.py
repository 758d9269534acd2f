"""Agent process launching and liveness."""

from dojo.agent.launcher import build_agent_env, launch_agent
from dojo.agent.state import AgentState, agent_state

__all__ = ["AgentState", "agent_state", "build_agent_env", "launch_agent"]
