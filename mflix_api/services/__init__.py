"""
Mflix API: Services Layer
=========================

Service Inventory:
    - DocumentStore (abstract) / MongoDocumentStore: single-collection operations
    - PaginatedQueryResolver: page + count with optional parent existence check
    - DocumentService: id-addressed get/create/update/delete for one collection
    - CommentService: DocumentService for comments, with movie checks on create
    - identifiers: ObjectId format validation

Services never import FastAPI or the global MongoDB client; they receive a
DocumentStore and raise exceptions from mflix_api.exceptions.
"""
