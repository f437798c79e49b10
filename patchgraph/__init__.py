from patchgraph.transformer import check_project, transform, transform_to_dict

__all__ = ["check_project", "transform", "transform_to_dict"]
