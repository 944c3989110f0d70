"""Firestore collection names (schema-in-code).

Every collection below lives under ``artifacts/{APP_ID}``. Firestore creates
collections on first write, so these constants are the single source of
truth for the layout the web client also writes to.
"""

ROOT_COLLECTION = "artifacts"

# Top-level collections under the app namespace
COLLECTION_CHAT_USERS = "chatUsers"
COLLECTION_POSTS = "peerPosts"
COLLECTION_CONVERSATIONS = "conversations"
COLLECTION_USERS = "users"
COLLECTION_BANNED_USERS = "bannedUsers"

# chatUsers/{uid}/...
SUBCOLLECTION_FRIENDS = "friends"
SUBCOLLECTION_FRIEND_REQUESTS = "friendRequests"
SUBCOLLECTION_SENT_REQUESTS = "sentRequests"
SUBCOLLECTION_SHARE_REQUESTS = "shareRequests"

# peerPosts/{postId}/...
SUBCOLLECTION_COMMENTS = "comments"

# conversations/{conversationId}/...
SUBCOLLECTION_MESSAGES = "messages"

# users/{uid}/...
SUBCOLLECTION_VOCABULARY = "vocabulary"
SUBCOLLECTION_METADATA = "metadata"
SUBCOLLECTION_PROFILE = "profile"

# Singleton documents under users/{uid}
METADATA_DOC_ID = "stats"
PROFILE_DOC_ID = "info"

HEALTH_CHECK_COLLECTION = "_health_check"
