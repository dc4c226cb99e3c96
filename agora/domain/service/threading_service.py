"""Comment threading domain service.

Comments are persisted flat, each one pointing at its parent. This service
turns that flat list back into an ordered reply tree and guards the
maximum nesting depth when replies are written.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import logfire

from agora.domain.model.comment import Comment, CommentView
from agora.domain.value import CommentId

from .base import Service

DEFAULT_MAX_REPLY_DEPTH = 6


@dataclass
class CommentTreeNode:
    """Node in a post's reply tree.

    Wraps an enriched comment together with its position in the thread.
    Built fresh on every read and never persisted.
    """

    comment: CommentView
    depth: int = 0
    replies: list["CommentTreeNode"] = field(default_factory=list)

    @property
    def id(self) -> CommentId:
        """ID of the wrapped comment."""
        return self.comment.id


def _sort_newest_first(nodes: list[CommentTreeNode]) -> None:
    # list.sort is stable, so ties keep their input order
    nodes.sort(key=lambda node: node.comment.created_at, reverse=True)


class ThreadingService(Service):
    """Domain service for reply trees and reply depth."""

    def __init__(self, max_reply_depth: int = DEFAULT_MAX_REPLY_DEPTH) -> None:
        """Initialize threading service.

        Args:
            max_reply_depth: Default hop limit used by validate_reply_depth
        """
        self.max_reply_depth = max_reply_depth

    def build_comment_tree(
        self, flat_comments: Sequence[CommentView]
    ) -> list[CommentTreeNode]:
        """Build the reply tree of a post from its flat comment list.

        Algorithm:
        1. Index a node for every comment by id
        2. Link each comment under its parent; comments without a parent,
           or whose parent is not in the list (orphans), become roots
        3. Walk down from the roots assigning depth and sorting every
           level newest first

        Args:
            flat_comments: Enriched comments of a single post, any order

        Returns:
            Root nodes, newest first, with replies populated recursively
        """
        with logfire.span(
            "threading_service.build_comment_tree", comment_count=len(flat_comments)
        ):
            # First pass: one node per comment
            nodes: dict[CommentId, CommentTreeNode] = {}
            for comment in flat_comments:
                nodes[comment.id] = CommentTreeNode(comment=comment)

            # Second pass: attach replies to their parents
            roots: list[CommentTreeNode] = []
            orphan_count = 0
            for node in nodes.values():
                parent_id = node.comment.parent_id
                parent = nodes.get(parent_id) if parent_id is not None else None
                if parent is None:
                    if parent_id is not None:
                        orphan_count += 1
                    roots.append(node)
                else:
                    parent.replies.append(node)

            # Depth and ordering are applied top-down with an explicit stack
            _sort_newest_first(roots)
            stack = list(roots)
            placed = 0
            while stack:
                node = stack.pop()
                placed += 1
                _sort_newest_first(node.replies)
                for reply in node.replies:
                    reply.depth = node.depth + 1
                    stack.append(reply)

            if orphan_count:
                logfire.info("Orphaned replies promoted to roots", count=orphan_count)
            if placed != len(nodes):
                logfire.warn(
                    "Comments unreachable from any root",
                    count=len(nodes) - placed,
                )

            return roots

    def validate_reply_depth(
        self,
        parent_id: CommentId,
        comments: Sequence[Comment],
        max_depth: Optional[int] = None,
    ) -> bool:
        """Check whether a new reply under ``parent_id`` stays within the limit.

        Walks the ancestor chain starting at the parent itself, one hop per
        comment found, stopping at a root, at a missing comment or after
        ``max_depth`` hops.

        Must be called with a fresh load of every comment of the post, taken
        right before the reply is inserted.

        Args:
            parent_id: The comment being replied to
            comments: All comments of the parent's post
            max_depth: Hop limit (defaults to the configured maximum)

        Returns:
            True if the number of hops is strictly below the limit
        """
        limit = self.max_reply_depth if max_depth is None else max_depth
        by_id = {comment.id: comment for comment in comments}

        hops = 0
        current: Optional[CommentId] = parent_id
        while current is not None and hops < limit:
            parent = by_id.get(current)
            if parent is None:
                break
            current = parent.parent_id
            hops += 1

        return hops < limit

    def flatten_comment_tree(
        self, tree: Sequence[CommentTreeNode]
    ) -> list[CommentTreeNode]:
        """Flatten a reply tree in display order.

        Each node is followed by its replies, depth first.

        Args:
            tree: Root nodes as returned by build_comment_tree

        Returns:
            Every node of the tree in pre-order
        """
        flattened: list[CommentTreeNode] = []
        stack = list(reversed(tree))
        while stack:
            node = stack.pop()
            flattened.append(node)
            stack.extend(reversed(node.replies))
        return flattened
