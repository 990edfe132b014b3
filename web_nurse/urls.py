from django.urls import path

from . import views

app_name = "web_nurse"

urlpatterns = [
    path("forms/start/", views.form_start, name="form_start"),
    path("forms/<int:form_id>/grid/", views.form_grid, name="form_grid"),
    path("forms/<int:form_id>/header/", views.form_header, name="form_header"),
    path("forms/<int:form_id>/comments/", views.form_comments, name="form_comments"),
    path("forms/<int:form_id>/line-items/", views.line_item_add, name="line_item_add"),
    path("forms/<int:form_id>/line-items/order/", views.line_item_order, name="line_item_order"),
    path("forms/<int:form_id>/prn/", views.prn_add, name="prn_add"),
    path("forms/<int:form_id>/vitals/<int:day>/", views.vital_sign_update, name="vital_sign_update"),
    path("line-items/<int:line_item_id>/field/", views.line_item_update, name="line_item_update"),
    path("line-items/<int:line_item_id>/move/", views.line_item_move, name="line_item_move"),
    path("line-items/<int:line_item_id>/delete/", views.line_item_delete, name="line_item_delete"),
    path(
        "line-items/<int:line_item_id>/days/<int:day>/",
        views.administration_set,
        name="administration_set",
    ),
    path(
        "line-items/<int:line_item_id>/days/<int:day>/demote/",
        views.administration_demote,
        name="administration_demote",
    ),
    path(
        "line-items/<int:line_item_id>/days/<int:day>/note/",
        views.administration_note,
        name="administration_note",
    ),
    path("prn/<int:record_id>/field/", views.prn_update_field, name="prn_update_field"),
    path("prn/<int:record_id>/delete/", views.prn_delete, name="prn_delete"),
    path("legends/", views.legends, name="legends"),
    path("legends/<int:legend_id>/delete/", views.legend_delete, name="legend_delete"),
]
