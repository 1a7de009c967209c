"""client/ -- Client-side session handling for the profile directory.

guard.py decides per navigation whether a view is shown or redirected.
session.py persists the (token, public user) pair between runs.
api.py talks to the HTTP API.

Layer rule: client/ never imports from api/, auth/, core/, or directory/.
It only knows the HTTP contract.
"""
