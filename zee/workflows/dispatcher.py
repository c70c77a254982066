from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from zee.agents.base import Agent
from zee.agents.router import ROUTER_NAME
from zee.errors import AgentNotFoundError, ZeeError
from zee.memory.transcript import ContextLog
from zee.schemas.messages import (
    ERROR_ROLE,
    Action,
    ActionMetadata,
    ActionType,
    AgentReply,
    ReplyKind,
    Turn,
)
from zee.schemas.tasks import AssignedTask
from zee.workflows.queue import ActionQueue
from zee.workflows.replies import ANSWER_MARKER, COMPLETE_MARKER, FOLLOWUP_MARKER, to_reply

logger = logging.getLogger(__name__)

AGENT_RULES = f"""You have to:
1. Complete your task by providing an answer ONLY for the 'Current task' from the context.
2. If the answer is not in the context, try to avoid asking for more information.
3. If you ABSOLUTELY need additional information to complete your task, request more information by asking a question

Instructions for responding:
- If you need more information, start with "{FOLLOWUP_MARKER}" followed by your question
- If this is your answer, start with "{COMPLETE_MARKER}" followed by your response."""

DEPENDENCY_SEPARATOR = "\n\nContext:"


class Dispatcher:
    """Drives the action queue one action at a time.

    Each iteration pops the next action. Completed actions are only recorded
    in the context log; every other action is sent to its target agent with
    a filtered view of the log, and the reply decides what gets queued next.
    Errors raised while handling one action never leave that action.
    """

    def __init__(
        self,
        agents: Iterable[Agent],
        context: ContextLog,
        queue: ActionQueue | None = None,
        router_name: str = ROUTER_NAME,
    ) -> None:
        self.agents: Dict[str, Agent] = {agent.name: agent for agent in agents}
        self.context = context
        self.queue = queue if queue is not None else ActionQueue()
        self.router_name = router_name

    def get_agent(self, name: str) -> Agent:
        agent = self.agents.get(name)
        if agent is None:
            raise AgentNotFoundError(name, list(self.agents))
        return agent

    def seed(self, tasks: Iterable[AssignedTask]) -> None:
        for task in tasks:
            self.queue.push_task(
                Action(
                    type=ActionType.REQUEST,
                    sender=self.router_name,
                    to=task.agent_name,
                    content=task.content,
                    metadata=ActionMetadata(
                        dependencies=list(task.dependencies),
                        attachments=[list(group) for group in task.attachments],
                    ),
                )
            )

    def run(self, max_iterations: int) -> int:
        """Process actions until the queue drains or the cap is hit.

        Returns the number of actions processed by this call.
        """
        processed = 0
        while self.queue and processed < max_iterations:
            processed += 1
            action = self.queue.pop()
            logger.info(
                "Iteration %d of max %d | queue size %d | %s from '%s' to '%s'",
                processed,
                max_iterations,
                len(self.queue) + 1,
                action.type.value,
                action.sender,
                action.to,
            )
            self.process(action)

        if self.queue:
            logger.warning(
                "Reached maximum iterations limit (%d) with %d action(s) pending",
                max_iterations,
                len(self.queue),
            )
        else:
            logger.info("All agents have completed their tasks")
        return processed

    def process(self, action: Action) -> None:
        if action.is_task_complete:
            if action.type is ActionType.RESPONSE:
                logger.info("Followup answer recorded for '%s'", action.to)
            else:
                logger.info("Task completed by '%s'", action.sender)
            self.context.append(action.sender, action.content)
            return

        try:
            self._dispatch(action)
        except AgentNotFoundError as exc:
            logger.error("%s", exc)
            if action.type is ActionType.FOLLOWUP and action.to != self.router_name:
                self._redirect_to_router(action)
                return
            self._record_error(action, exc)
        except ZeeError as exc:
            logger.error("Error processing action %s -> %s: %s", action.sender, action.to, exc)
            self._record_error(action, exc)

    def _dispatch(self, action: Action) -> None:
        target = self.get_agent(action.to)
        relevant = self.context.relevant_to(action, self.router_name)
        logger.debug("Relevant context for '%s': %s", action.to, relevant)
        logger.info("'%s' thinking...", action.to)

        result = target.generate(self.build_turns(action, relevant), response_model=AgentReply)
        self.handle_reply(to_reply(result), action)

    def build_turns(self, action: Action, relevant: Optional[str]) -> List[Turn]:
        turns: List[Turn] = []
        if action.to != self.router_name:
            turns.append(Turn("system", AGENT_RULES))
        elif action.type is ActionType.FOLLOWUP:
            turns.append(Turn("system", self._router_followup_prompt(action)))

        body = f"Relevant context -> {relevant}\n\n" if relevant else ""
        turns.append(Turn("user", f"{body}Current task -> {action.content}"))
        turns.extend(Turn("user", group) for group in action.metadata.attachments)
        return turns

    def _router_followup_prompt(self, action: Action) -> str:
        lines = [
            "You're handling a followup question from an agent who needs more "
            "information to complete their task."
        ]
        if action.metadata.original_from:
            lines.append(f"Question from: '{action.metadata.original_from}'")
        if action.metadata.original_task:
            lines.append(f"Original task: {action.metadata.original_task}")
        lines.extend(
            [
                "You have access to the COMPLETE context of all previous communications "
                "between agents. Use this full context to provide the most accurate and "
                "helpful answer.",
                f'Start your response with "{ANSWER_MARKER}" followed by your answer.',
                f'Example: "{ANSWER_MARKER} The script should use standard screenplay format."',
            ]
        )
        return "\n".join(lines)

    def handle_reply(self, reply: AgentReply, action: Action) -> None:
        to_router = action.to == self.router_name
        if to_router and action.type is ActionType.FOLLOWUP:
            self._answer(reply, action)
        elif reply.kind is ReplyKind.FOLLOWUP and not to_router:
            self._followup(reply, action)
        else:
            if not reply.tagged:
                logger.warning(
                    "Response from '%s' doesn't use expected format, treating as complete: %.100s",
                    action.to,
                    reply.payload,
                )
            elif reply.kind is not ReplyKind.COMPLETE:
                logger.warning(
                    "Unexpected %s reply from '%s', treating as complete", reply.kind.value, action.to
                )
            self._complete(reply, action)

    def _followup(self, reply: AgentReply, action: Action) -> None:
        names = action.metadata.dependency_names
        if names:
            dependency_info = f"{DEPENDENCY_SEPARATOR} Agent has dependencies on: {', '.join(names)}"
        else:
            dependency_info = f"{DEPENDENCY_SEPARATOR} Agent has no explicit dependencies"

        logger.info("'%s' asked a followup: %s", action.to, reply.payload)
        self.queue.push_resume(
            Action(
                type=ActionType.FOLLOWUP,
                sender=action.to,
                to=self.router_name,
                content=f"{reply.payload}{dependency_info}",
                metadata=ActionMetadata(
                    dependencies=list(action.metadata.dependencies),
                    attachments=list(action.metadata.attachments),
                    original_from=action.to,
                    original_task=action.content,
                ),
            )
        )
        logger.info("Followup chain: '%s' -> %s -> '%s'", action.to, self.router_name, action.to)

    def _answer(self, reply: AgentReply, action: Action) -> None:
        if reply.kind is not ReplyKind.ANSWER:
            logger.warning(
                "'%s' response missing %s prefix, treating as direct answer",
                self.router_name,
                ANSWER_MARKER,
            )
        answer = reply.payload
        logger.info("'%s' answered: %.100s", self.router_name, answer)

        metadata = action.metadata
        if metadata.original_from and metadata.original_task:
            question = action.content.split(DEPENDENCY_SEPARATOR)[0].strip()
            self.queue.push_resume(
                Action(
                    type=ActionType.REQUEST,
                    sender=self.router_name,
                    to=action.sender,
                    content=(
                        f"{metadata.original_task}\n\n"
                        f'You previously asked: "{question}"\n\n'
                        f"Answer from {self.router_name}: {answer}\n\n"
                        "Please complete your task with this information."
                    ),
                    metadata=ActionMetadata(
                        dependencies=list(metadata.dependencies),
                        attachments=list(metadata.attachments),
                    ),
                )
            )
        # Pushed last so the answer lands in the log before the resumed request runs.
        self.queue.push_resume(
            Action(
                type=ActionType.RESPONSE,
                sender=self.router_name,
                to=action.sender,
                content=answer,
                metadata=ActionMetadata(is_task_complete=True),
            )
        )
        logger.info("Answer being sent: '%s' -> '%s'", self.router_name, action.sender)

    def _complete(self, reply: AgentReply, action: Action) -> None:
        logger.info("'%s' completed task", action.to)
        self.queue.push_resume(
            Action(
                type=ActionType.COMPLETE,
                sender=action.to,
                to=action.sender,
                content=reply.payload,
                metadata=ActionMetadata(is_task_complete=True),
            )
        )

    def _redirect_to_router(self, action: Action) -> None:
        logger.warning(
            "Redirecting followup to '%s' instead of invalid agent '%s'",
            self.router_name,
            action.to,
        )
        self.queue.push_resume(
            replace(
                action,
                to=self.router_name,
                content=(
                    f"{action.content}\n\nNOTE: This was originally directed to "
                    f"'{action.to}' but that agent doesn't exist. "
                    "Please handle this followup request."
                ),
            )
        )

    def _record_error(self, action: Action, exc: Exception) -> None:
        self.context.append(
            ERROR_ROLE,
            f"Error in communication between {action.sender} -> {action.to}: {exc}",
        )
