"""Static permission requirements for workflow actions and triggers.

Each action and trigger type maps to the Discord permission flags the bot needs
to run it. Inference is a lookup-and-union over these tables, so every
supported action type must appear here; an empty tuple means the action needs
no guild permission (data operations, DMs, outbound HTTP).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

PermissionSeverity = Literal["safe", "moderate", "dangerous"]


ACTION_PERMISSION_MAPPINGS: dict[str, tuple[str, ...]] = {
    # --- Messaging ---
    "send_message": ("SEND_MESSAGES", "VIEW_CHANNEL"),
    "edit_message": ("SEND_MESSAGES", "VIEW_CHANNEL"),  # own messages only
    "send_direct_message": (),
    "delete_message": ("MANAGE_MESSAGES", "VIEW_CHANNEL"),
    "log_event": ("SEND_MESSAGES", "VIEW_CHANNEL"),
    # --- User management ---
    # Role changes also need the bot's highest role above the target role.
    "add_role": ("MANAGE_ROLES",),
    "remove_role": ("MANAGE_ROLES",),
    "change_nickname": ("MANAGE_NICKNAMES",),
    # --- Moderation ---
    "kick_user": ("KICK_MEMBERS",),
    "ban_user": ("BAN_MEMBERS",),
    "unban_user": ("BAN_MEMBERS",),
    "mute_user": ("MODERATE_MEMBERS",),  # Discord timeout
    "unmute_user": ("MODERATE_MEMBERS",),
    # --- Channel management ---
    "create_channel": ("MANAGE_CHANNELS",),
    "delete_channel": ("MANAGE_CHANNELS",),
    "create_category": ("MANAGE_CHANNELS",),
    "modify_channel": ("MANAGE_CHANNELS",),
    # --- Reactions and pins ---
    "add_reaction": ("ADD_REACTIONS", "VIEW_CHANNEL"),
    "remove_reaction": ("MANAGE_MESSAGES", "VIEW_CHANNEL"),  # any user's reaction
    "pin_message": ("MANAGE_MESSAGES", "VIEW_CHANNEL"),
    "unpin_message": ("MANAGE_MESSAGES", "VIEW_CHANNEL"),
    # --- Data ---
    "variable_update": (),
    "database_insert": (),
    "database_query": (),
    # --- External integrations ---
    "webhook_send": ("MANAGE_WEBHOOKS",),
    "http_request": (),
    "create_invite": ("CREATE_INSTANT_INVITE",),
}


# Permissions needed to *listen* for the event, not to cause it.
TRIGGER_PERMISSION_MAPPINGS: dict[str, tuple[str, ...]] = {
    # --- Members (passive) ---
    "user_join": (),
    "user_leave": (),
    "user_ban": (),
    "user_kick": (),
    "user_update": (),
    # --- Messages ---
    "send_message": ("VIEW_CHANNEL",),
    "message_delete": ("VIEW_CHANNEL",),
    "message_edit": ("VIEW_CHANNEL",),
    # --- Channels and roles (passive) ---
    "channel_create": (),
    "channel_delete": (),
    "role_create": (),
    "role_delete": (),
    "role_add": (),
    "role_remove": (),
    # --- Reactions ---
    "reaction_add": ("VIEW_CHANNEL",),
    "reaction_remove": ("VIEW_CHANNEL",),
    # --- Voice ---
    "voice_channel_join": ("VIEW_CHANNEL", "CONNECT"),
    "voice_channel_leave": ("VIEW_CHANNEL", "CONNECT"),
    # --- Server (passive) ---
    "server_update": (),
    # --- Commands (checked at execution time) ---
    "slash_command": (),
    "prefixed_command": (),
}


PERMISSION_SEVERITY: dict[str, PermissionSeverity] = {
    # Dangerous: can remove members or take over the server
    "ADMINISTRATOR": "dangerous",
    "BAN_MEMBERS": "dangerous",
    "KICK_MEMBERS": "dangerous",
    "MANAGE_GUILD": "dangerous",
    "MANAGE_ROLES": "dangerous",
    "MANAGE_WEBHOOKS": "dangerous",
    "MODERATE_MEMBERS": "dangerous",
    # Moderate
    "MANAGE_CHANNELS": "moderate",
    "MANAGE_MESSAGES": "moderate",
    "MANAGE_NICKNAMES": "moderate",
    "MANAGE_THREADS": "moderate",
    "MANAGE_EVENTS": "moderate",
    "MANAGE_EMOJIS_AND_STICKERS": "moderate",
    # Safe
    "SEND_MESSAGES": "safe",
    "VIEW_CHANNEL": "safe",
    "ADD_REACTIONS": "safe",
    "CREATE_INSTANT_INVITE": "safe",
    "READ_MESSAGE_HISTORY": "safe",
    "SEND_MESSAGES_IN_THREADS": "safe",
    "EMBED_LINKS": "safe",
    "ATTACH_FILES": "safe",
    "USE_EXTERNAL_EMOJIS": "safe",
    "USE_EXTERNAL_STICKERS": "safe",
    "CONNECT": "safe",
    "SPEAK": "safe",
    "STREAM": "safe",
    "USE_VAD": "safe",
    "CHANGE_NICKNAME": "safe",
    "USE_APPLICATION_COMMANDS": "safe",
}

SEVERITY_WEIGHTS: dict[PermissionSeverity, int] = {
    "dangerous": 10,
    "moderate": 3,
    "safe": 1,
}


PERMISSION_DESCRIPTIONS: dict[str, str] = {
    "SEND_MESSAGES": "Allows sending messages in text channels",
    "VIEW_CHANNEL": "Allows viewing channels and reading message history",
    "MANAGE_MESSAGES": "Allows deleting messages from other users and pinning messages",
    "MANAGE_ROLES": "Allows creating, editing, and deleting roles below bot's highest role",
    "BAN_MEMBERS": "Allows banning and unbanning members",
    "KICK_MEMBERS": "Allows kicking members from the server",
    "MANAGE_CHANNELS": "Allows creating, editing, and deleting channels",
    "MANAGE_NICKNAMES": "Allows changing other members' nicknames",
    "MODERATE_MEMBERS": "Allows timing out members to prevent them from sending messages",
    "ADD_REACTIONS": "Allows adding reactions to messages",
    "MANAGE_WEBHOOKS": "Allows creating, editing, and deleting webhooks",
    "CREATE_INSTANT_INVITE": "Allows creating instant invites to the server",
    "ADMINISTRATOR": "Grants all permissions and bypasses channel permission overwrites",
    "MANAGE_GUILD": "Allows managing server settings and configurations",
    "CONNECT": "Allows joining voice channels",
    "SPEAK": "Allows speaking in voice channels",
    "MANAGE_THREADS": "Allows managing threads (archive, delete, view private threads)",
    "MANAGE_EVENTS": "Allows creating, editing, and deleting server events",
    "MANAGE_EMOJIS_AND_STICKERS": "Allows managing custom emojis and stickers",
}


class PermissionInfo(BaseModel):
    """Display data for one permission flag."""

    name: str
    severity: PermissionSeverity
    description: str


def has_action_permission_mapping(action: str) -> bool:
    return action in ACTION_PERMISSION_MAPPINGS


def has_trigger_permission_mapping(trigger: str) -> bool:
    return trigger in TRIGGER_PERMISSION_MAPPINGS


def get_permission_severity(permission: str) -> PermissionSeverity:
    """Severity of a permission flag; unknown flags are treated as safe."""
    return PERMISSION_SEVERITY.get(permission, "safe")


def get_permission_description(permission: str) -> str:
    return PERMISSION_DESCRIPTIONS.get(permission, f"Discord permission: {permission}")


def describe_permission(permission: str) -> PermissionInfo:
    return PermissionInfo(
        name=permission,
        severity=get_permission_severity(permission),
        description=get_permission_description(permission),
    )
