"""Domain services for the job-board client.

- auth: session management (credentials, refresh, login/logout) and the
  current-user account operations built on top of it.
"""
