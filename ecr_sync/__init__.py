"""Create an ECR or ECR Public repository and keep its policies in sync."""
