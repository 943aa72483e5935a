"""
Backend package for the Aster & Co. site.

Serves page content and the back-office API on top of a document store
(Firestore, SQL or in-memory). Reads fall back to built-in content whenever
the store cannot supply live data.
"""
