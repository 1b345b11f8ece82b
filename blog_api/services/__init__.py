# Services package.
#
#   blog_service  BlogService: read / create / update / delete / streaming
#                 list over the blog collection
#
# BlogService takes its collection handle in the constructor, so the
# router (or a test) decides which collection a request talks to via the
# ``get_collection`` dependency.
